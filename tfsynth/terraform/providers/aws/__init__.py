"""AWS resource templates."""
