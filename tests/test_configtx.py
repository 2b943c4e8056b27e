"""Tests for configtx.yaml generation."""

import pytest
import yaml
from fabricarch.domain.models import Orderer, Organization, Peer
from fabricarch.generators import generate_configtx_yaml


def generate(organizations, orderers, consensus="etcdraft", channel="mychannel", **kwargs):
    return generate_configtx_yaml("TestNet", consensus, channel, organizations, orderers, **kwargs)


def parse(text: str) -> dict:
    return yaml.safe_load(text)


class TestMinimalNetwork:
    def test_organizations_profiles_and_consenters(self, org1, one_orderer):
        doc = parse(generate([org1], one_orderer))

        assert len(doc["Organizations"]) == 2
        assert set(doc["Profiles"]) == {"mychannelGenesis", "mychannelChannel"}
        assert len(doc["Orderer"]["EtcdRaft"]["Consenters"]) == 1

    def test_top_level_key_order(self, org1, one_orderer):
        doc = parse(generate([org1], one_orderer))

        assert list(doc) == [
            "Organizations",
            "Capabilities",
            "Application",
            "Orderer",
            "Channel",
            "Profiles",
        ]

    def test_orderer_organization_comes_first(self, org1, one_orderer):
        orderer_org, app_org = parse(generate([org1], one_orderer))["Organizations"]

        assert orderer_org["Name"] == "OrdererMSP"
        assert orderer_org["MSPDir"] == "crypto-config/ordererOrganizations/testnet.com/msp"
        assert orderer_org["OrdererEndpoints"] == ["orderer.testnet.com:7050"]
        assert app_org["Name"] == "Org1MSP"
        assert app_org["MSPDir"] == "crypto-config/peerOrganizations/org1.example.com/msp"

    def test_placeholder_organizations_are_null(self, org1, one_orderer):
        text = generate([org1], one_orderer)
        doc = parse(text)

        assert "Organizations" in doc["Application"]
        assert doc["Application"]["Organizations"] is None
        assert doc["Orderer"]["Organizations"] is None
        assert "Organizations: null" in text


class TestPolicies:
    def test_application_policy_rules_are_exact(self, org1, one_orderer):
        policies = parse(generate([org1], one_orderer))["Organizations"][1]["Policies"]

        assert policies == {
            "Readers": {"Type": "Signature", "Rule": "OR('Org1MSP.admin','Org1MSP.peer','Org1MSP.client')"},
            "Writers": {"Type": "Signature", "Rule": "OR('Org1MSP.admin','Org1MSP.client')"},
            "Admins": {"Type": "Signature", "Rule": "OR('Org1MSP.admin')"},
            "Endorsement": {"Type": "Signature", "Rule": "OR('Org1MSP.peer')"},
        }

    def test_orderer_policies_use_member_and_admin_only(self, org1, one_orderer):
        policies = parse(generate([org1], one_orderer))["Organizations"][0]["Policies"]

        rules = [policy["Rule"] for policy in policies.values()]
        assert set(policies) == {"Readers", "Writers", "Admins"}
        assert all(".client" not in rule and ".peer" not in rule for rule in rules)
        assert policies["Readers"]["Rule"] == "OR('OrdererMSP.member')"


class TestOrderers:
    def test_no_orderers_omits_orderer_organization(self, org1):
        doc = parse(generate([org1], []))

        assert len(doc["Organizations"]) == 1
        assert doc["Organizations"][0]["Name"] == "Org1MSP"
        assert doc["Profiles"]["mychannelGenesis"]["Orderer"]["Organizations"] == []

    def test_multiple_orderer_endpoints(self, org1):
        orderers = [Orderer(id=f"o{i}", name=f"o{i}") for i in range(3)]

        doc = parse(generate([org1], orderers))

        assert doc["Organizations"][0]["OrdererEndpoints"] == [
            "orderer.testnet.com:7050",
            "orderer1.testnet.com:7050",
            "orderer2.testnet.com:7050",
        ]
        consenter = doc["Orderer"]["EtcdRaft"]["Consenters"][1]
        assert consenter["Host"] == "orderer1.testnet.com"
        assert consenter["Port"] == 7050
        assert consenter["ClientTLSCert"] == (
            "crypto-config/ordererOrganizations/testnet.com/orderers/"
            "orderer1.testnet.com/tls/server.crt"
        )


class TestConsensus:
    def test_bft_emits_smart_bft_block(self, org1, one_orderer):
        orderer = parse(generate([org1], one_orderer, consensus="bft"))["Orderer"]

        assert orderer["OrdererType"] == "bft"
        assert orderer["SmartBFT"] == {
            "RequestBatchMaxCount": 100,
            "RequestBatchMaxInterval": "50ms",
            "IncomingMessageBufferSize": 200,
            "RequestPoolSize": 400,
            "LeaderHeartbeatTimeout": "1s",
        }
        assert "EtcdRaft" not in orderer

    def test_solo_emits_neither_block(self, org1, one_orderer):
        orderer = parse(generate([org1], one_orderer, consensus="solo"))["Orderer"]

        assert "EtcdRaft" not in orderer
        assert "SmartBFT" not in orderer

    def test_raft_alias(self, org1, one_orderer):
        doc = parse(generate([org1], one_orderer, consensus="raft"))

        assert doc["Orderer"]["OrdererType"] == "etcdraft"
        assert doc["Profiles"]["mychannelGenesis"]["Orderer"]["OrdererType"] == "etcdraft"

    def test_unknown_consensus_raises(self, org1, one_orderer):
        with pytest.raises(ValueError):
            generate([org1], one_orderer, consensus="paxos")


class TestProfiles:
    def test_profiles_reference_organizations_by_name_and_id(self, org1, one_orderer):
        org2 = Organization(id="org2", name="Org2")

        profiles = parse(generate([org1, org2], one_orderer, channel="supply"))["Profiles"]

        genesis = profiles["supplyGenesis"]
        assert genesis["Orderer"]["Organizations"] == [{"Name": "OrdererMSP", "ID": "OrdererMSP"}]
        assert genesis["Application"]["Organizations"] == [
            {"Name": "Org1MSP", "ID": "Org1MSP"},
            {"Name": "Org2MSP", "ID": "Org2MSP"},
        ]
        channel = profiles["supplyChannel"]
        assert "Orderer" not in channel
        assert channel["Application"]["Organizations"] == genesis["Application"]["Organizations"]


class TestEdgeCases:
    def test_empty_network_is_structurally_complete(self):
        doc = parse(generate([], []))

        assert doc["Organizations"] == []
        assert {"Capabilities", "Application", "Orderer", "Channel", "Profiles"} <= set(doc)

    def test_anchor_peers_from_member_peers(self, org1, one_orderer):
        peers = [Peer(id=f"p{i}", name=f"p{i}", organization_id="org1") for i in range(2)]

        org = parse(generate([org1], one_orderer, peers=peers))["Organizations"][1]

        assert org["AnchorPeers"] == [
            {"Host": "peer0.org1.example.com", "Port": 7051},
            {"Host": "peer1.org1.example.com", "Port": 7051},
        ]

    def test_output_is_deterministic(self, org1, one_orderer):
        assert generate([org1], one_orderer) == generate([org1], one_orderer)

    def test_header(self, org1, one_orderer):
        text = generate([org1], one_orderer, consensus="bft", channel="supply")
        header, _, body = text.partition("\n\n")

        lines = header.splitlines()
        assert lines[0] == "# Hyperledger Fabric configtx.yaml"
        assert "# Network: TestNet" in lines
        assert "# Consensus: bft" in lines
        assert "# Channel: supply" in lines
        assert lines[-1].startswith("# Reference: https://")
        assert body.startswith("Organizations:")
