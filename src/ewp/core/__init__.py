"""EWP core -- message types, errors, and configuration."""
