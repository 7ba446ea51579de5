#!/usr/bin/env python3

"""Infrastructure: configuration and logging."""
