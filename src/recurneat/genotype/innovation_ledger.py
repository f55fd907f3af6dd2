"""
Innovation Ledger Module

This module implements the InnovationLedger class and the records
mutations use to report the connections they created.

Classes:
    PendingConnection: Signature of a connection awaiting its innovation number
    PendingSplit:      Signatures of the two connections created by a node split
    InnovationLedger:  Population-wide registry of innovation numbers
"""

from typing import TYPE_CHECKING, NamedTuple

from loguru import logger

from recurneat.genotype.node_gene import NodeKey
from recurneat.run.config         import Config
if TYPE_CHECKING:
    from recurneat.genotype.genome import Genome

class PendingConnection(NamedTuple):
    """
    The structural signature of a connection created by a mutation.
    Captured when the connection is created, so later changes to the
    genome do not affect what gets registered.
    """
    source     : NodeKey
    destination: NodeKey
    recurrent  : bool

class PendingSplit(NamedTuple):
    """
    The signatures of the connections created by splitting a connection:
    'first' leads into the new node, 'second' leads out of it.
    """
    first : PendingConnection
    second: PendingConnection

class InnovationLedger:
    """
    Tracks structural changes across all genomes of a population.
    Ensures the same connection, identified by its endpoints and its
    recurrent flag, gets the same innovation number wherever it appears.

    Mutations never talk to the ledger directly. A mutated genome keeps its
    new connections under placeholder innovation numbers and reports their
    signatures; once a whole wave of mutations is done, 'reconcile' assigns
    the canonical numbers and has every genome rewrite its placeholders.

    Innovation numbers start right after the reserved input/output node
    slots, so a hidden node key (which is derived from an innovation number)
    can never coincide with an input or output node key.

    Public Methods:
        get_innovation_number(source, destination, recurrent): Look up or assign an innovation number
        reconcile(genomes, pending):                           Resolve a wave of pending signatures
        register(genome, pending_connection, pending_split):   Resolve the signatures of a single genome
    """

    def __init__(self, config: Config):
        """
        Initialize an empty ledger.

        Parameters:
            config: Stores configuration parameters
        """
        self._next_innovation_number: int = 1 + config.max_inputs + config.max_outputs

        # For each connection ever created, map its signature to its innovation number
        self._innovation_numbers: dict[tuple[NodeKey, NodeKey, bool], int] = {}

    @property
    def num_innovations(self) -> int:
        return len(self._innovation_numbers)

    def get_innovation_number(self, source: NodeKey, destination: NodeKey, recurrent: bool) -> int:
        """
        Get innovation number for a connection, identified by its signature.
        Returns existing innovation number if this connection was created
        before, otherwise assigns a new innovation number.

        Parameters:
            source:      key of the 'from' end of the connection
            destination: key of the 'to'   end of the connection
            recurrent:   whether the connection is recurrent

        Returns:
            connection ID (a.k.a. innovation number)
        """
        key = (source, destination, recurrent)

        # This is a new connection
        if key not in self._innovation_numbers:
            self._innovation_numbers[key] = self._next_innovation_number
            self._next_innovation_number += 1

        return self._innovation_numbers[key]

    def reconcile(self,
                  genomes: list['Genome'],
                  pending: list[tuple[int, PendingConnection | None, PendingSplit | None]]) -> None:
        """
        Assign canonical innovation numbers to the connections created by a wave of mutations.

        All connection signatures are registered first, in list order, then the
        split signatures (first connection before second). Registration order
        fixes which number each new structure gets, so the outcome only depends
        on the order of 'pending', never on the order the mutations finished in.

        Parameters:
            genomes: the genomes that were mutated
            pending: (index into 'genomes', pending connection, pending split) for
                     every genome that created new connections, in wave order

        Raises:
            RuntimeError: if a genome does not hold the placeholders its mutation reported
        """
        num_known = self.num_innovations

        for index, pending_connection, _ in pending:
            if pending_connection is None:
                continue
            innovation = self.get_innovation_number(*pending_connection)
            rewrites   = genomes[index].resolve_pending(innovation)
            if rewrites != 1:
                raise RuntimeError(f"Genome {index}: expected 1 pending connection, rewrote {rewrites}")

        for index, _, pending_split in pending:
            if pending_split is None:
                continue
            innovation1 = self.get_innovation_number(*pending_split.first)
            innovation2 = self.get_innovation_number(*pending_split.second)
            rewrites    = genomes[index].resolve_pending(innovation1, innovation2)
            if rewrites != 2:
                raise RuntimeError(f"Genome {index}: expected 2 pending connections, rewrote {rewrites}")

        logger.debug(f"Reconciled {len(pending)} pending mutation(s), "
                     f"{self.num_innovations - num_known} new innovation(s)")

    def register(self,
                 genome            : 'Genome',
                 pending_connection: PendingConnection | None,
                 pending_split     : PendingSplit | None) -> None:
        """
        Resolve the pending signatures of a single genome right away.

        Parameters:
            genome:             the genome that was mutated
            pending_connection: the connection its mutation created (if any)
            pending_split:      the split its mutation performed (if any)
        """
        if pending_connection is None and pending_split is None:
            return
        self.reconcile([genome], [(0, pending_connection, pending_split)])
