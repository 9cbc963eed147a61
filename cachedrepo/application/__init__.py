"""Application layer: ports consumed and exposed by repositories."""
