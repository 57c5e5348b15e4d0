"""Voice-command assistant for the storefront accessibility settings panel."""
