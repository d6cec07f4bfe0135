"""Route modules registered by proposal_digest.api.main."""
