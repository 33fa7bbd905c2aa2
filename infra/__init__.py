"""Deployment topology for the bonus claims platform (AWS CDK)."""
