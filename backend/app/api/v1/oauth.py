"""
OAuth proxy endpoints for GitHub and LinkedIn.

The SPA posts the authorization code (or access token) here; the backend
adds the client credentials and forwards the provider's JSON unchanged.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from app.api.deps import get_oauth_client
from app.services import OAuthClient, UpstreamProviderError

router = APIRouter()


# ============== Pydantic Schemas ==============


class CodeRequest(BaseModel):
    code: Optional[str] = None


class AccessTokenRequest(BaseModel):
    accessToken: Optional[str] = None


# ============== Helper Functions ==============


def _require_code(request: CodeRequest) -> str:
    if not request.code:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Authorization code is required")
    return request.code


def _require_token(request: AccessTokenRequest) -> str:
    if not request.accessToken:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Access token is required")
    return request.accessToken


def _upstream_failure(error: str, e: UpstreamProviderError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={"error": error, "message": e.message},
    )


# ============== API Endpoints ==============


@router.post("/getAccessToken")
async def github_access_token(request: CodeRequest, oauth: OAuthClient = Depends(get_oauth_client)):
    code = _require_code(request)
    try:
        return await oauth.github_access_token(code)
    except UpstreamProviderError as e:
        raise _upstream_failure("Failed to obtain access token", e)


@router.post("/getUserData")
async def github_user_data(request: AccessTokenRequest, oauth: OAuthClient = Depends(get_oauth_client)):
    token = _require_token(request)
    try:
        return await oauth.github_user(token)
    except UpstreamProviderError as e:
        raise _upstream_failure("Failed to fetch user data", e)


@router.post("/getLinkedInAccessToken")
async def linkedin_access_token(request: CodeRequest, oauth: OAuthClient = Depends(get_oauth_client)):
    code = _require_code(request)
    try:
        return await oauth.linkedin_access_token(code)
    except UpstreamProviderError as e:
        raise _upstream_failure("Failed to obtain LinkedIn access token", e)


@router.post("/getLinkedInUserData")
async def linkedin_user_data(request: AccessTokenRequest, oauth: OAuthClient = Depends(get_oauth_client)):
    token = _require_token(request)
    try:
        return await oauth.linkedin_userinfo(token)
    except UpstreamProviderError as e:
        raise _upstream_failure("Failed to fetch LinkedIn user data", e)


@router.post("/getLinkedInProfileDetails")
async def linkedin_profile_details(request: AccessTokenRequest, oauth: OAuthClient = Depends(get_oauth_client)):
    token = _require_token(request)
    try:
        return await oauth.linkedin_profile_details(token)
    except UpstreamProviderError as e:
        raise _upstream_failure("Failed to fetch LinkedIn profile details", e)
