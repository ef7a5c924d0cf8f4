"""BootstrapCDN Web Package."""
