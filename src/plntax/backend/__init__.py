"""Backend services for the PLNTax calculator."""
