#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from ui.cli import cli


def main():
    cli(prog_name="trophy-todo")


if __name__ == "__main__":
    main()
