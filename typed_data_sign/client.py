"""Client holding the default account and the verifier domain lookup"""

from typing import Optional

from .domain import Eip712DomainLookup, Web3Eip712DomainLookup
from .signers import AccountLike


class Client:
    def __init__(
        self,
        account: Optional[AccountLike] = None,
        domain_lookup: Optional[Eip712DomainLookup] = None,
        w3=None,
    ):
        self.account = account
        self.w3 = w3
        if domain_lookup is None and w3 is not None:
            domain_lookup = Web3Eip712DomainLookup(w3)
        self.domain_lookup = domain_lookup

    @classmethod
    def from_web3(cls, w3, account: Optional[AccountLike] = None) -> "Client":
        return cls(account=account, w3=w3)
