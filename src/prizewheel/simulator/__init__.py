"""Desktop simulator for the prize wheel."""
