"""Sample model package used by the generator tests."""
