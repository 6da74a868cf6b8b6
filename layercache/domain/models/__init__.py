"""Value objects shared by every cache layer."""
