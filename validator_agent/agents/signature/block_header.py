"""
RLP encoding of block headers as returned by `eth_getBlockByNumber`.
"""

from typing import Any, List, Mapping

import rlp
from hexbytes import HexBytes
from web3 import Web3

BASE_FIELDS = (
    'parentHash',
    'sha3Uncles',
    'miner',
    'stateRoot',
    'transactionsRoot',
    'receiptsRoot',
    'logsBloom',
    'difficulty',
    'number',
    'gasLimit',
    'gasUsed',
    'timestamp',
    'extraData',
)

POW_SEAL_FIELDS = ('mixHash', 'nonce')

# Appended in fork order when the node reports them
FORK_FIELDS = (
    'baseFeePerGas',
    'withdrawalsRoot',
    'blobGasUsed',
    'excessBlobGas',
    'parentBeaconBlockRoot',
    'requestsHash',
)


def _to_rlp_item(value: Any):
    if isinstance(value, int):
        return value
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if isinstance(value, str):
        return bytes(HexBytes(value))
    raise TypeError(f"Unsupported header value type: {type(value).__name__}")


def header_fields(block: Mapping[str, Any]) -> List:
    """
    Ordered RLP items of a block header.

    Aura-sealed blocks carry `sealFields` (each already RLP encoded) in place
    of `mixHash` and `nonce`.
    """
    missing = [name for name in BASE_FIELDS if name not in block]
    if missing:
        raise ValueError(f"Block is missing header fields: {', '.join(missing)}")

    items = [_to_rlp_item(block[name]) for name in BASE_FIELDS]

    if all(name in block for name in POW_SEAL_FIELDS):
        items.extend(_to_rlp_item(block[name]) for name in POW_SEAL_FIELDS)
    elif block.get('sealFields'):
        items.extend(rlp.decode(bytes(HexBytes(field))) for field in block['sealFields'])
    else:
        raise ValueError("Block has neither mixHash/nonce nor sealFields")

    for name in FORK_FIELDS:
        if block.get(name) is None:
            break
        items.append(_to_rlp_item(block[name]))

    return items


def encode_header(block: Mapping[str, Any]) -> bytes:
    return rlp.encode(header_fields(block))


def header_hash(rlp_header: bytes) -> bytes:
    return bytes(Web3.keccak(rlp_header))
