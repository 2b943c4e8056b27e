"""Tests for the network data model."""

import pytest
from fabricarch.domain.models import (
    Channel,
    ConsensusType,
    NetworkConfig,
    NetworkCreate,
    NetworkUpdate,
    NodeKind,
    Organization,
    Peer,
)
from pydantic import ValidationError


class TestOrganization:
    def test_defaults_derived_from_name(self):
        org = Organization(id="org1", name="Org1")

        assert org.msp_id == "Org1MSP"
        assert org.domain == "org1.example.com"

    def test_default_derivation_is_idempotent(self):
        org = Organization(id="org1", name="Org1")
        again = Organization.model_validate(org.model_dump())

        assert again.msp_id == org.msp_id
        assert again.domain == org.domain

    def test_explicit_values_kept(self):
        org = Organization.model_validate(
            {"id": "o", "name": "Acme", "mspId": "AcmeOrgMSP", "domain": "acme.io"}
        )

        assert org.msp_id == "AcmeOrgMSP"
        assert org.domain == "acme.io"

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            Organization(id="o", name="")


class TestWireFormat:
    def test_camel_case_aliases(self):
        peer = Peer.model_validate({"id": "p", "name": "peer0", "organizationId": "org1"})

        dumped = peer.model_dump(by_alias=True)
        assert dumped["organizationId"] == "org1"
        assert dumped["tlsEnabled"] is True
        assert dumped["couchDbEnabled"] is False

    def test_channel_membership_aliases(self):
        channel = Channel.model_validate(
            {"id": "c", "name": "ch", "organizations": ["a", "b"], "orderers": ["o"]}
        )

        assert channel.organization_ids == ["a", "b"]
        assert channel.orderer_ids == ["o"]
        assert channel.model_dump(by_alias=True)["organizations"] == ["a", "b"]

    def test_canvas_node_kind(self):
        network = NetworkConfig.model_validate(
            {
                "id": "n",
                "name": "Canvas",
                "nodes": [{"id": "a", "type": "organization", "label": "Org1"}],
            }
        )

        assert network.nodes[0].type is NodeKind.organization
        assert network.nodes[0].position.x == 0.0


class TestConsensus:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("etcdraft", ConsensusType.etcdraft),
            ("raft", ConsensusType.etcdraft),
            ("BFT", ConsensusType.bft),
            ("solo", ConsensusType.solo),
        ],
    )
    def test_parse(self, value, expected):
        assert ConsensusType.parse(value) is expected

    def test_unknown_consensus_raises(self):
        with pytest.raises(ValueError, match="paxos"):
            ConsensusType.parse("paxos")

    def test_network_normalizes_consensus(self):
        network = NetworkCreate(name="Net", consensus_type="raft")
        assert network.consensus_type is ConsensusType.etcdraft

    def test_network_rejects_unknown_consensus(self):
        with pytest.raises(ValidationError):
            NetworkCreate(name="Net", consensus_type="paxos")


class TestNetworkUpdate:
    def test_only_set_fields_are_dumped(self):
        update = NetworkUpdate.model_validate({"channelName": "newchannel"})

        assert update.model_dump(exclude_unset=True) == {"channel_name": "newchannel"}

    def test_defaults(self):
        network = NetworkCreate(name="Net")

        assert network.channel_name == "mychannel"
        assert network.consensus_type is ConsensusType.etcdraft
        assert network.organizations == []
