"""Fungible token ledger template. Deploy `mint_contracts.token_template.contract`."""

CONTRACT = "mint_contracts.token_template.contract"
