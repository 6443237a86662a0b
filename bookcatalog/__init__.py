"""Book catalog web application."""
