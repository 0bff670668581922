# SmartSaver: utility-consumption dashboard (water + electricity)

__version__ = "0.3.0"
