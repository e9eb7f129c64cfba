"""Data subpackage - example price data and loaders."""
