"""Tests for the access token middleware."""
import logging
import pytest
from datetime import timedelta

import jwt

from tokenauth.auth.errors import AuthorizationError
from tokenauth.auth.middleware import AuthMiddleware

WRONG_SECRET = "someone-elses-secret-0123456789abcdef"


class TestAuthMiddleware:
    """Test each rejection path and the accept path."""
    
    @pytest.fixture
    def middleware(self, validator):
        """Create middleware over the test validator."""
        return AuthMiddleware(validator)
    
    def _reject(self, middleware, header):
        with pytest.raises(AuthorizationError) as exc_info:
            middleware.authenticate(header)
        return exc_info.value
    
    @pytest.mark.parametrize("header", [None, ""])
    def test_missing_header(self, middleware, header):
        """Test absent header is 401."""
        error = self._reject(middleware, header)
        
        assert error.status_code == 401
        assert error.message == "Authorization Token is required"
    
    @pytest.mark.parametrize("header", ["Token abc", "bearer abc", "Bearer", "Bearer a Bearer b"])
    def test_wrong_format(self, middleware, header):
        """Test anything but exactly one Bearer prefix is 400."""
        error = self._reject(middleware, header)
        
        assert error.status_code == 400
        assert error.message == "Incorrect Format of Authorization Token"
    
    def test_wrong_key(self, middleware, make_token):
        """Test token signed with another key is 401."""
        token = make_token(WRONG_SECRET, sub="user123", Username="alice")
        error = self._reject(middleware, f"Bearer {token}")
        
        assert error.status_code == 401
        assert error.message == "Invalid Token"
    
    def test_expired(self, middleware, make_token, test_config):
        """Test expired token is 401."""
        token = make_token(test_config.access_token_secret, timedelta(minutes=-1), sub="user123")
        error = self._reject(middleware, f"Bearer {token}")
        
        assert error.status_code == 401
        assert error.message == "Invalid Token"
    
    @pytest.mark.parametrize("header", ["Bearer ", "Bearer abc", "Bearer invalid.token.here"])
    def test_malformed(self, middleware, header):
        """Test undecodable token is 400."""
        error = self._reject(middleware, header)
        
        assert error.status_code == 400
        assert error.message == "Bad Request"
    
    def test_refresh_token_rejected(self, middleware, issuer):
        """Test refresh token cannot be used as an access token."""
        tokens = issuer.generate_token("alice", "user123")
        error = self._reject(middleware, f"Bearer {tokens.refresh_token}")
        
        assert error.status_code == 401
    
    def test_valid_token(self, middleware, issuer):
        """Test freshly minted token is accepted."""
        token = issuer.generate_access_token("alice", "user123")
        claims = middleware.authenticate(f"Bearer {token}")
        
        assert claims.subject == "user123"
        assert claims.username == "alice"
    
    def test_token_whitespace_trimmed(self, middleware, issuer):
        """Test whitespace around the token is ignored."""
        token = issuer.generate_access_token("alice", "user123")
        claims = middleware.authenticate(f"Bearer   {token}  ")
        
        assert claims.subject == "user123"
    
    def test_rejection_logged(self, middleware, caplog):
        """Test rejections are logged at error level."""
        with caplog.at_level(logging.ERROR):
            self._reject(middleware, None)
            self._reject(middleware, "Token abc")
        
        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 2
        
    def test_error_body(self):
        """Test error renders as status and message."""
        error = AuthorizationError(401, "Invalid Token")
        
        assert error.to_dict() == {"status": 401, "message": "Invalid Token"}
    
    @pytest.mark.parametrize("claims", [
        {"sub": "user123", "exp": 10**15},
        {"sub": "user123", "exp": 10**15, "iat": 10**15},
    ])
    def test_out_of_range_timestamp(self, middleware, test_config, claims):
        """Test correctly signed token with an unrepresentable timestamp is 400."""
        token = jwt.encode(claims, test_config.access_token_secret, algorithm="HS256")
        error = self._reject(middleware, f"Bearer {token}")
        
        assert error.status_code == 400
        assert error.message == "Bad Request"
