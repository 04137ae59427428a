"""Contact-form email relay: resolves a receiver name and forwards the message via Amazon SES."""
