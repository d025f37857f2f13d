"""Static champion data: models and loaders."""
