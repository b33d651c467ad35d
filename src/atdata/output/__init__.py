"""Output layer — render ServiceResult for humans (rich) or machines (JSON)."""
