"""
Generate command.
"""

from __future__ import annotations

from pathlib import Path

from fabricarch.cli.common import load_network_or_report
from fabricarch.cli.ux import console, error, header, info, success
from fabricarch.core.errors import ConfigurationError, main_with_error_handling
from fabricarch.generators import ArtifactKind, write_network_artifacts

ALL_ARTIFACTS = "all"
ARTIFACT_CHOICES = [kind.value for kind in ArtifactKind] + [ALL_ARTIFACTS]


def _selected_kinds(artifact: str) -> list[ArtifactKind]:
    if artifact == ALL_ARTIFACTS:
        return list(ArtifactKind)
    return [ArtifactKind(artifact)]


@main_with_error_handling()
def generate_command(
    artifact: str,
    network_file: str,
    output_dir: str = "generated",
    dry_run: bool = False,
) -> int:
    """
    Generate Fabric configuration documents from a network file.

    Args:
        artifact: configtx, crypto-config, docker-compose or all
        network_file: Path to network YAML/JSON file
        output_dir: Directory the documents are written into
        dry_run: Preview without writing files

    Returns:
        Exit code (0 = success, 10 = unreadable network or write failure)
    """
    header("Generate Fabric Artifacts")
    console.print()

    if dry_run:
        info("DRY RUN MODE - No files will be written")
        console.print()

    network = load_network_or_report(network_file)
    kinds = _selected_kinds(artifact)

    console.print(f"[bold]Network:[/bold] {network.name}")
    console.print(f"[bold]Consensus:[/bold] {network.consensus_type.value}")
    console.print(f"[bold]Channel:[/bold] {network.channel_name}")
    console.print()

    output_path = Path(output_dir)
    if dry_run:
        for kind in kinds:
            console.print(f"Would generate {kind.filename}", soft_wrap=True)
        console.print(f"   [muted]Output:[/muted] {output_path}", soft_wrap=True)
        console.print()
        return 0

    result = write_network_artifacts(network, output_path, kinds)
    if not result.success:
        error(f"Generation failed: {result.error}")
        console.print()
        raise ConfigurationError(
            f"Could not write artifacts to {output_path}",
            details={"error": result.error},
        )

    success(f"Generated {len(result.output_files)} artifact(s) for {result.network}")
    for path in result.output_files:
        console.print(f"   [success]•[/success] {path}", soft_wrap=True)
    console.print()
    return 0
