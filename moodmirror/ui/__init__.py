"""Streamlit dashboard"""
