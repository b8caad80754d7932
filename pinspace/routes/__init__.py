"""Flask blueprints for the accounts application."""
