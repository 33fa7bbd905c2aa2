"""Code shared by the user and admin services."""
