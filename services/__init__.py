"""
CertTrack Services
Business operations over a BackendGateway, each taking an explicit SessionContext
"""
