"""
fabricarch: compile Hyperledger Fabric network topologies into
configtx, crypto-config and docker-compose documents.
"""

__version__ = "0.1.0"
