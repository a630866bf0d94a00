""" Update the version number in JSON and YAML files from a pushed Git tag and commit the change back. """

__version__ = "0.1.0"
