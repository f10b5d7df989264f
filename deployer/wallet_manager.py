"""
Wallet Manager
Resolves the signing identities available for a deployment
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence
from web3 import Web3
from eth_account import Account
from eth_account.signers.local import LocalAccount
from loguru import logger


HD_PATH_TEMPLATE = "m/44'/60'/0'/0/{index}"


@dataclass
class Signer:
    """
    An address able to authorize transactions

    Local signers hold the key; node signers are unlocked accounts on the
    RPC node (e.g. a Hardhat node).
    """

    address: str
    account: Optional[LocalAccount] = None

    @property
    def is_local(self) -> bool:
        return self.account is not None

    def sign_transaction(self, transaction: Dict):
        """Sign a transaction with the local key"""
        if self.account is None:
            raise ValueError(f"Signer {self.address} is managed by the node and cannot sign locally")

        return self.account.sign_transaction(transaction)

    def send_transaction(self, w3: Web3, transaction: Dict):
        """
        Sign (if local) and broadcast a transaction

        Args:
            w3: Web3 instance
            transaction: Transaction dict

        Returns:
            Transaction hash
        """
        if self.account is None:
            return w3.eth.send_transaction(transaction)

        signed_tx = self.sign_transaction(transaction)
        return w3.eth.send_raw_transaction(signed_tx.raw_transaction)


class WalletManager:
    """
    Ordered signer lookup

    Precedence: explicit private keys, then mnemonic-derived accounts, then
    the node's own accounts.
    """

    def __init__(
        self,
        w3: Web3,
        private_keys: Sequence[str] = (),
        mnemonic: Optional[str] = None,
        mnemonic_account_count: int = 1
    ):
        """
        Initialize wallet manager

        Args:
            w3: Web3 instance (used for node-managed accounts)
            private_keys: Hex private keys
            mnemonic: BIP-39 phrase
            mnemonic_account_count: Accounts to derive from the mnemonic
        """
        self.w3 = w3
        self.private_keys = list(private_keys)
        self.mnemonic = mnemonic
        self.mnemonic_account_count = mnemonic_account_count

    def get_signers(self) -> List[Signer]:
        """
        List available signers in precedence order

        Returns:
            Signers (may be empty)
        """
        if self.private_keys:
            signers = [self._from_private_key(key) for key in self.private_keys]
            logger.debug(f"Loaded {len(signers)} signer(s) from private keys")
            return signers

        if self.mnemonic:
            signers = self._from_mnemonic()
            logger.debug(f"Derived {len(signers)} signer(s) from mnemonic")
            return signers

        accounts = self.w3.eth.accounts
        logger.debug(f"Using {len(accounts)} node-managed account(s)")
        return [Signer(address=Web3.to_checksum_address(address)) for address in accounts]

    def _from_private_key(self, private_key: str) -> Signer:
        try:
            account = Account.from_key(private_key)
        except (ValueError, TypeError) as e:
            # never echo the key itself
            raise ValueError(f"Invalid deployer private key: {type(e).__name__}") from None

        return Signer(address=account.address, account=account)

    def _from_mnemonic(self) -> List[Signer]:
        Account.enable_unaudited_hdwallet_features()

        signers = []
        for index in range(self.mnemonic_account_count):
            account = Account.from_mnemonic(
                self.mnemonic,
                account_path=HD_PATH_TEMPLATE.format(index=index)
            )
            signers.append(Signer(address=account.address, account=account))

        return signers

    def get_balance(self, signer: Signer) -> int:
        """Native balance of a signer in wei"""
        return self.w3.eth.get_balance(signer.address)
