"""WEB API for provision_ai."""
