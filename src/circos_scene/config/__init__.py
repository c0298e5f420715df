"""Style defaults and the configuration resolver."""
