"""Click plumbing shared by the root command."""
