"""Tests for rendering the full artifact set of a saved network."""

import yaml
from fabricarch.domain.models import NetworkConfig, Orderer, Organization
from fabricarch.generators import (
    ArtifactKind,
    render_artifact,
    render_network_artifacts,
    write_network_artifacts,
)


def three_orderer_network() -> NetworkConfig:
    return NetworkConfig(
        id="n1",
        name="Supply",
        organizations=[Organization(id="org1", name="Org1"), Organization(id="org2", name="Org2")],
        orderers=[Orderer(id=f"o{i}", name=f"o{i}") for i in range(3)],
    )


class TestNamingAgreement:
    def test_orderer_hostnames_match_across_documents(self):
        documents = render_network_artifacts(three_orderer_network())
        configtx = yaml.safe_load(documents[ArtifactKind.configtx])
        crypto = yaml.safe_load(documents[ArtifactKind.crypto_config])
        compose = yaml.safe_load(documents[ArtifactKind.docker_compose])

        consenter_hosts = [c["Host"] for c in configtx["Orderer"]["EtcdRaft"]["Consenters"]]
        orderer_org = crypto["OrdererOrgs"][0]
        crypto_hosts = [f"{spec['Hostname']}.{orderer_org['Domain']}" for spec in orderer_org["Specs"]]
        compose_hosts = [name for name in compose["services"] if name.startswith("orderer")]

        assert consenter_hosts == crypto_hosts == compose_hosts
        assert consenter_hosts == ["orderer.supply.com", "orderer1.supply.com", "orderer2.supply.com"]

    def test_organization_domains_match_across_documents(self):
        documents = render_network_artifacts(three_orderer_network())
        crypto = yaml.safe_load(documents[ArtifactKind.crypto_config])
        compose = yaml.safe_load(documents[ArtifactKind.docker_compose])

        domains = [org["Domain"] for org in crypto["PeerOrgs"]]
        assert domains == ["org1.example.com", "org2.example.com"]
        for domain in domains:
            assert f"peer0.{domain}" in compose["services"]


class TestRendering:
    def test_render_single_artifact_by_name(self, production_network):
        text = render_artifact(production_network, "crypto-config")

        assert text.startswith("# Hyperledger Fabric crypto-config.yaml")

    def test_configtx_uses_network_channel_and_consensus(self, production_network):
        doc = yaml.safe_load(render_artifact(production_network, ArtifactKind.configtx))

        assert set(doc["Profiles"]) == {"prodchannelGenesis", "prodchannelChannel"}
        assert doc["Orderer"]["OrdererType"] == "etcdraft"

    def test_render_all_by_default(self, production_network):
        assert list(render_network_artifacts(production_network)) == list(ArtifactKind)

    def test_filenames(self):
        assert [kind.filename for kind in ArtifactKind] == [
            "configtx.yaml",
            "crypto-config.yaml",
            "docker-compose.yaml",
        ]


class TestWriting:
    def test_writes_requested_documents(self, tmp_path, production_network):
        result = write_network_artifacts(
            production_network, tmp_path / "out", [ArtifactKind.docker_compose]
        )

        assert result.success
        assert result.output_files == [tmp_path / "out" / "docker-compose.yaml"]
        assert "peer0.org1.example.com" in result.output_files[0].read_text()

    def test_write_failure_is_reported(self, tmp_path, production_network):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("x")

        result = write_network_artifacts(production_network, blocker)

        assert not result.success
        assert result.error
        assert result.output_files == []
