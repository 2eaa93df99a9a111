#!/usr/bin/env python
# coding=utf-8

"""Run the soundchanger command line interface."""

from .soundchanger import main

main(prog_name="soundchanger")
