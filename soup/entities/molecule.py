"""Molecule instances carried by particles."""

from dataclasses import dataclass


@dataclass
class Molecule:
    """A symbolic molecule with display colour and energy.

    Attributes:
        structure: Species tag, e.g. "A" or "AB"
        colour: Display colour of the species (hex string)
        energy: Energy held by this molecule
        reacting: Frames left to render the reaction highlight
    """

    structure: str
    colour: str
    energy: float = 0.0
    reacting: int = 0

    def is_template(self) -> bool:
        """Only composite molecules can template replication."""
        return len(self.structure) > 1

    def monomers(self) -> list:
        """Monomer tags this molecule is built from ('AB' -> ['A', 'B'])."""
        return list(self.structure)

    def tick_flash(self) -> None:
        """Count down the highlight by one frame."""
        if self.reacting > 0:
            self.reacting -= 1
