"""Order desk: order creation backed by a user directory and a mailer."""
