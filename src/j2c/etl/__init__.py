"""JSON -> CSV pipeline: extract (loader), transform (flatten, unify), load (emit)."""
