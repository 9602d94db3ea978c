"""Command-line interface for hub-deploy"""
