"""Services: checks and the runner that evaluates them."""
