"""Contest status classification, calendar projection and data-source plumbing."""
