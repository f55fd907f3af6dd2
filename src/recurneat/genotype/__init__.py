"""
Genotype Package

This package implements the genotype representation of evolving networks.
It provides classes for encoding neural network structures and parameters
at the genetic level, and the machinery that changes them.

A genotype consists of two types of genes:
- Node genes:       Encode individual neurons (type, activation function, runtime values)
- Connection genes: Encode weighted, optionally gated, connections with innovation numbers

Modules:
    node_gene:         NodeKey, NodeType and NodeGene classes
    connection_gene:   ConnectionGene class and placeholder innovation numbers
    layering:          Evaluation order, recurrent flags and candidate sets
    mutation:          MutationType enumeration and mutation operators
    innovation_ledger: InnovationLedger class and pending signatures
    genome:            Genome class

Exported Classes:
    NodeKey:           Stable structural identity of a node
    NodeType:          Enumeration for node types (INPUT, HIDDEN, OUTPUT)
    NodeGene:          Gene encoding a single network node
    ConnectionGene:    Gene encoding a weighted connection between nodes
    MutationType:      Enumeration of the weighted mutation operators
    InnovationLedger:  Population-wide registry of innovation numbers
    PendingConnection: Signature of a connection awaiting its innovation number
    PendingSplit:      Signatures of the two connections created by a node split
    Genome:            Complete genome representing a neural network
    CapacityError:     Raised when a genome runs out of reserved input/output slots
"""

from recurneat.genotype.connection_gene   import ConnectionGene, PENDING_FIRST, PENDING_SECOND
from recurneat.genotype.genome            import CapacityError, Genome
from recurneat.genotype.innovation_ledger import InnovationLedger, PendingConnection, PendingSplit
from recurneat.genotype.mutation          import MutationType
from recurneat.genotype.node_gene         import BIAS_KEY, NodeKey, NodeType, NodeGene

__all__ = ['BIAS_KEY',
           'CapacityError',
           'ConnectionGene',
           'Genome',
           'InnovationLedger',
           'MutationType',
           'NodeGene',
           'NodeKey',
           'NodeType',
           'PENDING_FIRST',
           'PENDING_SECOND',
           'PendingConnection',
           'PendingSplit']
