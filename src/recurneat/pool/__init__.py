"""
Pool Package

This package implements the population-level machinery: the population
itself, its division into species, and reproduction.

Modules:
    species:         Species class
    species_manager: SpeciesManager class
    population:      Population class

Exported Classes:
    Species:        A cluster of genetically similar genomes
    SpeciesManager: Manages all species, handles speciation and offspring allocation
    Population:     Top-level evolutionary coordinator managing genomes and generations
"""

from recurneat.pool.population      import Population
from recurneat.pool.species         import Species
from recurneat.pool.species_manager import SpeciesManager

__all__ = ['Population',
           'Species',
           'SpeciesManager']
