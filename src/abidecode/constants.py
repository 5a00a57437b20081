from __future__ import annotations

# ABI layout
WORD_SIZE = 32
MAX_OFFSET = 2**64 - 1

# Decoder limits
DEFAULT_MAX_DEPTH = 64
DEFAULT_MAX_BUFFER_SIZE = 16 * 1024 * 1024

# topic0 constants (lowercase, 0x-prefixed)
TRANSFER_T0         = "0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef"
APPROVAL_T0         = "0x8c5be1e5ebec7d5bd14f71427d1e84f3dd0314c0f7b2291e5b200ac8c7c3b925"
APPROVAL_FOR_ALL_T0 = "0x17307eab39ab6107e8899845ad3d59bd9653f200f220920489ca2b5937696c31"
