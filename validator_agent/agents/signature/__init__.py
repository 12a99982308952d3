from .attestation_signer import (
    AttestationStrategy,
    BlockAttestationSigner,
    HomeChainAttestationStrategy,
    SatelliteAttestationStrategy
)

__all__ = [
    'AttestationStrategy',
    'BlockAttestationSigner',
    'HomeChainAttestationStrategy',
    'SatelliteAttestationStrategy'
]
