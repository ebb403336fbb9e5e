"""Services module for quickdo - ingestion, organization, storage, assistant."""
