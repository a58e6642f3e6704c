"""EIP-712 domain for GPv2 settlements.

The domain separator binds order signatures to a single deployment: a
signature produced for one domain never recovers the same owner under
another, which prevents replaying orders across chains or contracts.
"""

import os
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple, TypedDict

from eth_abi import encode
from eth_utils import is_address, keccak, to_checksum_address


DEFAULT_DOMAIN_NAME = "Gnosis Protocol"
DEFAULT_DOMAIN_VERSION = "v2"

# Environment variables read by domain_from_env
ENV_DOMAIN_NAME = "GPV2_DOMAIN_NAME"
ENV_DOMAIN_VERSION = "GPV2_DOMAIN_VERSION"
ENV_CHAIN_ID = "GPV2_CHAIN_ID"
ENV_VERIFYING_CONTRACT = "GPV2_VERIFYING_CONTRACT"


class DomainConfig(TypedDict, total=False):
    """Domain configuration, as supplied by the deploying context."""

    name: str
    """Domain name. Default: "Gnosis Protocol" """

    version: str
    """Domain version. Default: "v2" """

    chain_id: int
    """Chain ID of the deployment (optional)"""

    verifying_contract: str
    """Address of the settlement contract (optional)"""


@dataclass(frozen=True)
class Domain:
    """EIP-712 domain. Fields left as None are not part of the domain type."""

    name: str
    version: Optional[str] = None
    chain_id: Optional[int] = None
    verifying_contract: Optional[str] = None

    def eip712_fields(self) -> List[Tuple[str, str, Any]]:
        """Present domain fields as (EIP-712 name, type, value), in canonical order."""
        fields = [("name", "string", self.name)]
        if self.version is not None:
            fields.append(("version", "string", self.version))
        if self.chain_id is not None:
            fields.append(("chainId", "uint256", self.chain_id))
        if self.verifying_contract is not None:
            fields.append(("verifyingContract", "address", self.verifying_contract))
        return fields

    def to_eip712_dict(self) -> Dict[str, Any]:
        """Domain data in the form accepted by eth_account."""
        return {name: value for name, _, value in self.eip712_fields()}


def create_domain(
    name: str,
    version: Optional[str] = None,
    chain_id: Optional[int] = None,
    verifying_contract: Optional[str] = None,
) -> Domain:
    """Create an EIP-712 domain.

    Args:
        name: Domain name
        version: Domain version (optional)
        chain_id: Chain ID of the deployment (optional)
        verifying_contract: Address of the settlement contract (optional)

    Returns:
        Domain with a checksummed verifying contract

    Raises:
        ValueError: If the verifying contract address or chain ID is invalid
    """
    if verifying_contract is not None:
        if not is_address(verifying_contract):
            raise ValueError(f"Invalid verifying contract: {verifying_contract}")
        verifying_contract = to_checksum_address(verifying_contract)

    if chain_id is not None and chain_id < 0:
        raise ValueError(f"Invalid chain ID: {chain_id}")

    return Domain(
        name=name,
        version=version,
        chain_id=chain_id,
        verifying_contract=verifying_contract,
    )


def resolve_domain(config: Optional[DomainConfig] = None) -> Domain:
    """Create a domain from configuration, applying defaults."""
    config = config or {}
    return create_domain(
        name=config.get("name", DEFAULT_DOMAIN_NAME),
        version=config.get("version", DEFAULT_DOMAIN_VERSION),
        chain_id=config.get("chain_id"),
        verifying_contract=config.get("verifying_contract"),
    )


def domain_from_env(environ: Optional[Mapping[str, str]] = None) -> Domain:
    """Create a domain from GPV2_* environment variables.

    Args:
        environ: Mapping to read instead of os.environ

    Returns:
        Resolved domain

    Raises:
        ValueError: If GPV2_CHAIN_ID is not an integer or the contract is invalid
    """
    environ = os.environ if environ is None else environ

    config: DomainConfig = {}
    if environ.get(ENV_DOMAIN_NAME):
        config["name"] = environ[ENV_DOMAIN_NAME]
    if environ.get(ENV_DOMAIN_VERSION):
        config["version"] = environ[ENV_DOMAIN_VERSION]
    if environ.get(ENV_CHAIN_ID):
        try:
            config["chain_id"] = int(environ[ENV_CHAIN_ID], 0)
        except ValueError:
            raise ValueError(
                f"Invalid {ENV_CHAIN_ID}: {environ[ENV_CHAIN_ID]}"
            ) from None
    if environ.get(ENV_VERIFYING_CONTRACT):
        config["verifying_contract"] = environ[ENV_VERIFYING_CONTRACT]

    return resolve_domain(config)


def domain_separator(domain: Domain) -> bytes:
    """Compute the EIP-712 domain separator.

    Args:
        domain: EIP-712 domain

    Returns:
        32-byte domain separator
    """
    fields = domain.eip712_fields()
    type_string = (
        "EIP712Domain("
        + ",".join(f"{field_type} {name}" for name, field_type, _ in fields)
        + ")"
    )

    # Equals the `.header` of encode_typed_data for the same domain.
    # Strings are hashed, atomic values are ABI encoded as 32-byte words
    types = ["bytes32"]
    values: List[Any] = [keccak(text=type_string)]
    for _, field_type, value in fields:
        if field_type == "string":
            types.append("bytes32")
            values.append(keccak(text=value))
        else:
            types.append(field_type)
            values.append(value)

    return keccak(encode(types, values))
