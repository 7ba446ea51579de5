#!/usr/bin/env python3

"""Domain layer: models, services and caches for argument-order checking."""
