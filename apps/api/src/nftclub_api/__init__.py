"""NFT Club user API service."""
