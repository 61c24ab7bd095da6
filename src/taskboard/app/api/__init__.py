"""HTTP surface of the taskboard service."""
