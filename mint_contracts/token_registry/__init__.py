"""Shared token registry. Deploy `mint_contracts.token_registry.contract` once."""

CONTRACT = "mint_contracts.token_registry.contract"
