"""
recurneat - evolution of recurrent, gated neural networks.

This package evolves small directed graphs (genomes) with NEAT-style structural
and weight mutations. Networks may contain cycles: they are evaluated layer by
layer, and recurrent connections read the values of the previous time step.
New structure discovered independently by different genomes is reconciled by
a population-wide innovation ledger, and the population is divided into species
using a self-tuning compatibility threshold.

Main components:
- genotype:    Genetic encoding (genes, genome, layering, mutation, innovation ledger)
- phenotype:   Network execution
- pool:        Population, species and reproduction
- run:         Configuration
- activations: Activation functions

Example:
    >>> from recurneat import Config, Population
    >>> config = Config("config.ini")
    >>> population = Population(config)
    >>> for genome, outputs in zip(population.genomes, population.forward([[0.0, 1.0]] * len(population.genomes))):
    ...     genome.fitness = -abs(outputs[0] - 1.0)
    >>> population.spawn_next_generation()
"""

__version__ = "0.1.0"

# Import main classes for convenient access
from recurneat.run.config                 import Config
from recurneat.genotype.genome            import CapacityError, Genome
from recurneat.genotype.node_gene         import NodeGene, NodeKey, NodeType
from recurneat.genotype.connection_gene   import ConnectionGene
from recurneat.genotype.innovation_ledger import InnovationLedger
from recurneat.genotype.mutation          import MutationType
from recurneat.phenotype.network          import Network
from recurneat.pool.population            import Population

__all__ = [
    'CapacityError',
    'Config',
    'ConnectionGene',
    'Genome',
    'InnovationLedger',
    'MutationType',
    'Network',
    'NodeGene',
    'NodeKey',
    'NodeType',
    'Population',
]
