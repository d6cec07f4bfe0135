"""HTTP surface of proposal-digest."""
