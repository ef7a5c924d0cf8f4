"""BootstrapCDN site package."""
