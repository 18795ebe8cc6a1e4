"""Click subcommands registered on the ``pepver`` group."""
