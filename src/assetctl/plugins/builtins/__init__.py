"""Built-in plugins shipped with assetctl."""
