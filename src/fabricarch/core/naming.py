"""
Naming and port conventions shared by every generated document.

configtx.yaml, crypto-config.yaml and docker-compose.yaml cross-reference
each other by hostname, domain and crypto-material path. All three builders
derive those values from the functions below and nowhere else.
"""

from __future__ import annotations

ORDERER_PORT = 7050
PEER_PORT = 7051
CA_PORT = 7054

ORDERER_MSP_ID = "OrdererMSP"
ORDERER_ORG_NAME = "Orderer"

# docker-compose always emits this many peers per organization
PEERS_PER_ORGANIZATION = 2

# Host ports reserved per organization, of which PEERS_PER_ORGANIZATION are
# used. Orderer host ports (7050 + i) run into organization 0's block from the
# second orderer on. Consumers depend on the exact formulas.
PORTS_PER_ORGANIZATION = 10

CRYPTO_CONFIG_DIR = "crypto-config"

# Where the peer CLI container mounts the crypto-config tree
CLI_CRYPTO_ROOT = "/opt/gopath/src/github.com/hyperledger/fabric/peer/crypto"


def default_msp_id(name: str) -> str:
    """MSP id used when an organization does not set one: ``Org1`` -> ``Org1MSP``."""
    return f"{name}MSP"


def default_domain(name: str) -> str:
    """Domain used when an organization does not set one: ``Org1`` -> ``org1.example.com``."""
    return f"{name.lower()}.example.com"


def resolve_msp_id(name: str, msp_id: str | None = None) -> str:
    return msp_id or default_msp_id(name)


def resolve_domain(name: str, domain: str | None = None) -> str:
    return domain or default_domain(name)


def orderer_hostname(index: int) -> str:
    """``orderer`` for the first orderer, then ``orderer1``, ``orderer2``, ..."""
    return f"orderer{index if index > 0 else ''}"


def orderer_domain(network_name: str) -> str:
    return f"{network_name.lower()}.com"


def peer_hostname(index: int, domain: str) -> str:
    return f"peer{index}.{domain}"


def orderer_external_port(index: int) -> int:
    return ORDERER_PORT + index


def peer_external_port(org_index: int, peer_index: int) -> int:
    return PEER_PORT + peer_index + org_index * PORTS_PER_ORGANIZATION


def peer_org_dir(domain: str) -> str:
    return f"{CRYPTO_CONFIG_DIR}/peerOrganizations/{domain}"


def orderer_org_dir(domain: str) -> str:
    return f"{CRYPTO_CONFIG_DIR}/ordererOrganizations/{domain}"


def peer_node_dir(domain: str, peer_name: str) -> str:
    return f"{peer_org_dir(domain)}/peers/{peer_name}"


def orderer_node_dir(domain: str, fqdn: str) -> str:
    return f"{orderer_org_dir(domain)}/orderers/{fqdn}"


def cli_crypto_path(path: str) -> str:
    """Map a ``crypto-config/...`` path to its location inside the peer CLI container."""
    return f"{CLI_CRYPTO_ROOT}/{path.removeprefix(CRYPTO_CONFIG_DIR + '/')}"
