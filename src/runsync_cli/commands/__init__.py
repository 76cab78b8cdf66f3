"""runsync CLI commands."""
