"""Services for provision_ai."""
