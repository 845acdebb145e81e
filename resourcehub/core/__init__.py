"""Core domain rules: exceptions, plans, listing options, security helpers."""
