from bridgeagg.domain.enums.conflict import OnConflict
from bridgeagg.domain.enums.protocol import ChainProtocol
from bridgeagg.domain.enums.verification import ArgTransform, CompanionCheck

__all__ = [
    "ArgTransform",
    "ChainProtocol",
    "CompanionCheck",
    "OnConflict",
]
