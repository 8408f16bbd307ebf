"""Upstream product transaction feed: provider and seeding pipeline."""
