"""Front ends: the interactive console and plain-text rendering."""
