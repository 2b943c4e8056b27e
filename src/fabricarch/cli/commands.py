"""
Peer commands command.
"""

from __future__ import annotations

from fabricarch.cli.common import load_network_or_report
from fabricarch.cli.ux import console, header
from fabricarch.core.errors import main_with_error_handling
from fabricarch.generators import PeerCommandKind, network_peer_command, network_peer_commands

COMMAND_CHOICES = [kind.value for kind in PeerCommandKind]


@main_with_error_handling()
def commands_command(network_file: str, command: str | None = None) -> int:
    """
    Print peer CLI commands for a network.

    With ``command`` only that command is printed, unformatted, so it can be
    piped into a shell.

    Returns:
        Exit code (0 = success, 10 = unreadable network)
    """
    network = load_network_or_report(network_file)

    if command is not None:
        print(network_peer_command(network, command).command)
        return 0

    header(f"Peer Commands: {network.name}")
    for peer_command in network_peer_commands(network):
        console.print()
        console.print(f"[bold]{peer_command.title}[/bold] [muted]({peer_command.kind.value})[/muted]")
        console.print(f"[info]{peer_command.description}[/info]")
        console.print(peer_command.command, markup=False, highlight=False, soft_wrap=True)
    console.print()
    return 0
