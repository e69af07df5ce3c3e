"""Turn-based multiplayer board game rules engine."""
