"""
Phenotype Package

This package implements the phenotype representation of evolving networks:
it expresses genomes as executable neural networks.

The phenotype layer transforms the genetic representation (genotype) into a
functioning neural network that can process inputs and produce outputs. The
runtime state of the network lives on the genome's node genes, so that a
recurrent network remembers its previous time step between calls.

Modules:
    network: Layer-by-layer evaluation of a (possibly recurrent) network

Exported Classes:
    Network: Executes one time step of the network encoded by a genome
"""

from recurneat.phenotype.network import Network

__all__ = ['Network']
