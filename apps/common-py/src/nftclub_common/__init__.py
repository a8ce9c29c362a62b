"""Shared user domain for the NFT Club API."""
