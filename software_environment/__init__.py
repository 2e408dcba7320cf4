from .classifier import EnvironmentClassifier, classify_software_environment

__all__ = [
    "EnvironmentClassifier",
    "classify_software_environment",
]
