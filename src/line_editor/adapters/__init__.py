"""Front-end adapters that drive an editor session."""
