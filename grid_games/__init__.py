"""Host framework for turn-based, grid-displayed mini-games."""
