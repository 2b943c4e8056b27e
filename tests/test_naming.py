"""Tests for shared naming and port conventions."""

from fabricarch.core.naming import (
    cli_crypto_path,
    default_domain,
    default_msp_id,
    orderer_domain,
    orderer_external_port,
    orderer_hostname,
    orderer_node_dir,
    peer_external_port,
    peer_hostname,
    peer_node_dir,
    resolve_domain,
    resolve_msp_id,
)


class TestDefaults:
    def test_msp_id_and_domain_from_name(self):
        assert default_msp_id("Org1") == "Org1MSP"
        assert default_domain("Org1") == "org1.example.com"

    def test_explicit_values_win(self):
        assert resolve_msp_id("Org1", "CustomMSP") == "CustomMSP"
        assert resolve_domain("Org1", "org1.acme.io") == "org1.acme.io"

    def test_empty_values_fall_back(self):
        assert resolve_msp_id("Org2", "") == "Org2MSP"
        assert resolve_domain("Org2", None) == "org2.example.com"


class TestHostnames:
    def test_first_orderer_has_no_suffix(self):
        assert orderer_hostname(0) == "orderer"
        assert orderer_hostname(1) == "orderer1"
        assert orderer_hostname(2) == "orderer2"

    def test_orderer_domain_is_lowercased_network_name(self):
        assert orderer_domain("Production") == "production.com"

    def test_peer_hostname(self):
        assert peer_hostname(1, "org1.example.com") == "peer1.org1.example.com"

    def test_crypto_material_paths(self):
        assert (
            peer_node_dir("org1.example.com", "peer0.org1.example.com")
            == "crypto-config/peerOrganizations/org1.example.com/peers/peer0.org1.example.com"
        )
        assert (
            orderer_node_dir("net.com", "orderer.net.com")
            == "crypto-config/ordererOrganizations/net.com/orderers/orderer.net.com"
        )


class TestPorts:
    def test_orderer_ports(self):
        assert [orderer_external_port(i) for i in range(3)] == [7050, 7051, 7052]

    def test_peer_ports_for_three_organizations(self):
        ports = {peer_external_port(o, p) for o in range(3) for p in range(2)}
        assert ports == {7051, 7052, 7061, 7062, 7071, 7072}

    def test_ten_organizations_do_not_overlap(self):
        ports = [peer_external_port(o, p) for o in range(10) for p in range(2)]
        assert len(ports) == len(set(ports))

    def test_second_orderer_overlaps_first_peer_known_limit(self):
        # Kept exact: downstream tooling relies on both formulas
        assert orderer_external_port(1) == peer_external_port(0, 0)


def test_cli_crypto_path_maps_into_container():
    path = peer_node_dir("org1.example.com", "peer0.org1.example.com")

    assert cli_crypto_path(f"{path}/tls/ca.crt") == (
        "/opt/gopath/src/github.com/hyperledger/fabric/peer/crypto"
        "/peerOrganizations/org1.example.com/peers/peer0.org1.example.com/tls/ca.crt"
    )
