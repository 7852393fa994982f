"""SecurePass application package."""
