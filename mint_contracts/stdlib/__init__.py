# -*- coding: utf-8 -*-
"""
mint_contracts.stdlib
=====================

Helpers shared by the bundled contracts. Everything here runs *inside* a
contract call and only touches the VM through `mint_vm.stdlib`
(storage/events/abi), so the helpers inherit the call's journal and its
all-or-nothing semantics.

Subpackages
-----------
- token    : ledger error codes, metadata limits and storage layout
- math     : checked u128 arithmetic
- access   : single-owner access control
- registry : bounded owner index and CBOR-encoded registry entries
- utils    : canonical event names and emit helpers
"""
