"""runsync command line interface."""
