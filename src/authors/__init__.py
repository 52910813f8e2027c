"""Authors app: authors listed with statistics about their public posts."""
