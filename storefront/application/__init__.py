"""Application layer - DTOs and use-case services."""
