"""HTTP client for the Paws eligibility API."""
