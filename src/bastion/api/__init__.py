"""HTTP controller and view layer for Bastion."""
