import typing as t

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from starlette.responses import JSONResponse, Response

from api.utils.logger import logger, myself
from api.utils.wallet import parse_csv_wallets, preview_candidates
from core.auth import get_current_active_user
from core.constants import WalletCategory, WalletSource
from core.errors import ValidationError
from db.session import get_db
from db.crud.projects import get_owned_project
from db.crud.wallets import (
    get_wallets,
    add_wallet,
    bulk_import,
    remove_wallets,
    export_active,
)
from db.schemas.wallets import AddWallet, BulkImportResult, ImportPreviewRow, RemoveWallets, Wallet

from config import Config, Environment
CFG = Config[Environment]

whitelist_router = r = APIRouter()


async def read_upload(upload: UploadFile) -> str:
    content = await upload.read(CFG.maxUploadBytes + 1)
    if len(content) > CFG.maxUploadBytes:
        raise ValidationError(f"file is larger than {CFG.maxUploadBytes} bytes")
    try:
        return content.decode('utf-8-sig')
    except UnicodeDecodeError:
        raise ValidationError("file must be utf-8 text")


@r.get("/{project_id}/wallets", response_model=t.List[Wallet], name="whitelist:wallets")
def wallets_list(
    project_id: int,
    category: t.Optional[WalletCategory] = None,
    search: t.Optional[str] = None,
    db=Depends(get_db),
    current_user=Depends(get_current_active_user),
):
    """
    Active wallets, newest first
    """
    try:
        get_owned_project(db, project_id, current_user.id)
        return get_wallets(db, project_id, category, search)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f'ERR:{myself()}: {e}')
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=f'{str(e)}')


@r.post("/{project_id}/wallets", response_model=Wallet, status_code=status.HTTP_201_CREATED, name="whitelist:add")
def wallets_add(
    project_id: int,
    wallet: AddWallet,
    db=Depends(get_db),
    current_user=Depends(get_current_active_user),
):
    try:
        get_owned_project(db, project_id, current_user.id)
        return add_wallet(db, project_id, wallet, WalletSource.manual, current_user.id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f'ERR:{myself()}: {e}')
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=f'{str(e)}')


@r.post("/{project_id}/wallets/remove", name="whitelist:remove")
def wallets_remove(
    project_id: int,
    req: RemoveWallets,
    db=Depends(get_db),
    current_user=Depends(get_current_active_user),
):
    """
    Soft delete the selected wallets
    """
    try:
        get_owned_project(db, project_id, current_user.id)
        return {"removed": remove_wallets(db, project_id, req.ids, current_user.id)}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f'ERR:{myself()}: {e}')
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=f'{str(e)}')


@r.post("/{project_id}/wallets/import/preview", response_model=t.List[ImportPreviewRow], name="whitelist:import-preview")
async def wallets_import_preview(
    project_id: int,
    file: UploadFile = File(...),
    db=Depends(get_db),
    current_user=Depends(get_current_active_user),
):
    """
    Parse and validate a csv upload without writing anything
    """
    try:
        project = get_owned_project(db, project_id, current_user.id)
        return preview_candidates(parse_csv_wallets(await read_upload(file)), project.chain)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f'ERR:{myself()}: {e}')
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=f'{str(e)}')


@r.post("/{project_id}/wallets/import", response_model=BulkImportResult, name="whitelist:import")
async def wallets_import(
    project_id: int,
    file: UploadFile = File(...),
    db=Depends(get_db),
    current_user=Depends(get_current_active_user),
):
    try:
        get_owned_project(db, project_id, current_user.id)
        candidates = parse_csv_wallets(await read_upload(file))
        return bulk_import(db, project_id, candidates, current_user.id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f'ERR:{myself()}: {e}')
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=f'{str(e)}')


@r.get("/{project_id}/wallets/export", name="whitelist:export")
def wallets_export(
    project_id: int,
    category: t.Optional[WalletCategory] = None,
    search: t.Optional[str] = None,
    db=Depends(get_db),
    current_user=Depends(get_current_active_user),
):
    """
    Download active wallets as csv
    """
    try:
        project = get_owned_project(db, project_id, current_user.id)
        filename = f"{project.name or 'whitelist'}-wallets.csv".replace('"', '')
        filename = filename.encode('ascii', 'ignore').decode() or 'whitelist-wallets.csv'
        return Response(
            content=export_active(db, project_id, category, search),
            media_type="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f'ERR:{myself()}: {e}')
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=f'{str(e)}')
