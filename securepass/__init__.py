"""SecurePass: secure password generation service."""
