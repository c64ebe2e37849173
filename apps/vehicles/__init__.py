"""Member vehicle inventory and additional expenses."""
