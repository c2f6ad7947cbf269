"""Model package whose column overrides are not plain literals."""
