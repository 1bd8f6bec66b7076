# license_bundle/api/audit.py
"""
HTTP routes over the audit workflow.

The root is always the served manifest (`LICENSE_BUNDLE_MANIFEST`) or an
installed package named by `package`; clients cannot pick filesystem paths.
"""
import logging

from fastapi import APIRouter, HTTPException, Query

from license_bundle.core.errors import LicenseTextError, ResolutionFailure
from license_bundle.models.schemas import (
    BundleResponse,
    CompatibilityResponse,
    ListingResponse,
    PairCompatibilityResponse,
)
from license_bundle.services.audit_workflow import check_pair, perform_bundle, perform_check, perform_listing

logger = logging.getLogger(__name__)

router = APIRouter()


# ------------------------------------------------------------------
# 1. LIST: dependencies grouped by license
# ------------------------------------------------------------------
@router.get("/licenses", response_model=ListingResponse)
def list_licenses(package: str | None = None):
    """
    Example: /api/licenses?package=requests
    """
    try:
        return perform_listing(package=package)
    except ResolutionFailure as rf:
        raise HTTPException(status_code=400, detail=str(rf))
    except Exception as e:
        logger.exception("Listing failed")
        raise HTTPException(status_code=500, detail=f"Internal error: {str(e)}")


# ------------------------------------------------------------------
# 2. BUNDLE: document with the full license texts
# ------------------------------------------------------------------
@router.get("/bundle", response_model=BundleResponse)
def bundle_licenses(package: str | None = None):
    """
    Aborts with 422 as soon as one license has no text available.
    """
    try:
        return perform_bundle(package=package)
    except ResolutionFailure as rf:
        raise HTTPException(status_code=400, detail=str(rf))
    except LicenseTextError as te:
        raise HTTPException(status_code=422, detail=str(te))
    except Exception as e:
        logger.exception("Bundling failed")
        raise HTTPException(status_code=500, detail=f"Internal error: {str(e)}")


# ------------------------------------------------------------------
# 3. COMPATIBILITY: every dependency against the root license
# ------------------------------------------------------------------
@router.get("/compatibility", response_model=CompatibilityResponse)
def check_dependencies(package: str | None = None):
    try:
        return perform_check(package=package)
    except ResolutionFailure as rf:
        raise HTTPException(status_code=400, detail=str(rf))
    except Exception as e:
        logger.exception("Compatibility check failed")
        raise HTTPException(status_code=500, detail=f"Internal error: {str(e)}")


# ------------------------------------------------------------------
# 4. PAIR: the compatibility oracle on two declarations
# ------------------------------------------------------------------
@router.get("/compatibility/pair", response_model=PairCompatibilityResponse)
def check_license_pair(consumer: str = Query(...), dependency: str = Query(...)):
    """
    Example: /api/compatibility/pair?consumer=GPL-3.0&dependency=MIT/Apache-2.0
    """
    return check_pair(consumer, dependency)
