"""Route computation engine."""

from .annealing import simulated_annealing
from .constructive import nearest_neighbor
from .errors import DegenerateInputError, InsufficientPointsError, InvalidEndpointError, RoutingError
from .evaluation import build_tour, evaluate_path, path_length
from .exact import a_star_route, brute_force
from .genetic import GeneticParameters, genetic_algorithm
from .local_search import two_opt
from .matrix import DistanceMatrix, build_distance_matrix
from .models import ALL_METHODS, MethodComparison, OptimizationMethod, Segment, Tour
from .solver import calculate_best_route, compare_methods, solve

__all__ = [
    "ALL_METHODS",
    "DegenerateInputError",
    "DistanceMatrix",
    "GeneticParameters",
    "InsufficientPointsError",
    "InvalidEndpointError",
    "MethodComparison",
    "OptimizationMethod",
    "RoutingError",
    "Segment",
    "Tour",
    "a_star_route",
    "brute_force",
    "build_distance_matrix",
    "build_tour",
    "calculate_best_route",
    "compare_methods",
    "evaluate_path",
    "genetic_algorithm",
    "nearest_neighbor",
    "path_length",
    "simulated_annealing",
    "solve",
    "two_opt",
]
