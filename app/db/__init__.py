"""Persistence layer"""
