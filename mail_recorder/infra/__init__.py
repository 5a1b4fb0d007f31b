"""Infrastructure: email delivery and logging."""
