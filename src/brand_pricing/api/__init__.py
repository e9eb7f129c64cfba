"""API subpackage - HTTP interface to the pricing service."""
