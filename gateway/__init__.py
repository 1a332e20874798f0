"""HTTP gateway for triage and outcome scoring"""
