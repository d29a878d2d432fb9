"""Browser-free tests of the framework, page objects and reporting."""
