"""
Security utilities: agent authentication and guest lookup rate limiting
"""

from fastapi import HTTPException, Depends, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
import secrets
import time
from collections import defaultdict

from app.core.config import settings

# Simple in-memory rate limiter
rate_limiter = defaultdict(list)

security = HTTPBearer()

def verify_admin_token(credentials: HTTPAuthorizationCredentials = Depends(security)):
    """Verify agent authentication token"""
    if not secrets.compare_digest(credentials.credentials, settings.ADMIN_TOKEN):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid admin token"
        )
    return credentials.credentials

def rate_limit_check(client_ip: str, scope: str = "lookup", limit: int = None) -> bool:
    """Simple rate limiting by IP address, counted separately per scope"""
    if limit is None:
        limit = settings.RATE_LIMIT_PER_MINUTE
    
    current_time = time.time()
    minute_ago = current_time - 60
    
    key = f"{scope}:{client_ip}"
    
    # Clean old requests
    rate_limiter[key] = [
        req_time for req_time in rate_limiter[key]
        if req_time > minute_ago
    ]
    
    if len(rate_limiter[key]) >= limit:
        return False
    
    rate_limiter[key].append(current_time)
    return True

def get_client_ip(request) -> str:
    """Extract client IP from request"""
    if not settings.TRUST_PROXY_HEADERS:
        return request.client.host
    
    # Reverse proxy setups pass the original client along
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    
    # Check for real IP header
    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip
    
    # Fall back to direct client IP
    return request.client.host
