"""
Careers API - job listings and applications

Endpoints:
    GET    /api/careers/jobs
    GET    /api/careers/jobs/{job_id}
    POST   /api/careers/jobs
    PUT    /api/careers/jobs/{job_id}
    DELETE /api/careers/jobs/{job_id}
    GET    /api/careers/applications
    POST   /api/careers/applications   multipart: jobId, name, email, phone,
                                       coverLetter (optional), resume (file)
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from app.api.deps import get_upload_storage, repository
from app.repositories import JobApplicationRepository, JobListingRepository
from app.schemas import DataResponse, JobApplication, JobListing, JobListingInput, OkResponse
from app.services.uploads import RESUMES, UploadStorage

logger = logging.getLogger(__name__)
router = APIRouter()


# ==================== Job listings ====================

@router.get("/jobs", response_model=DataResponse[List[JobListing]])
async def list_jobs(
    repo: JobListingRepository = Depends(repository(JobListingRepository)),
):
    return DataResponse(data=await repo.list())


@router.get("/jobs/{job_id}", response_model=DataResponse[JobListing])
async def get_job(
    job_id: str,
    repo: JobListingRepository = Depends(repository(JobListingRepository)),
):
    return DataResponse(data=await repo.get(job_id))


@router.post("/jobs", response_model=DataResponse[JobListing], status_code=201)
async def create_job(
    payload: JobListingInput,
    repo: JobListingRepository = Depends(repository(JobListingRepository)),
):
    return DataResponse(data=await repo.create(payload.model_dump()))


@router.put("/jobs/{job_id}", response_model=DataResponse[JobListing])
async def update_job(
    job_id: str,
    payload: JobListingInput,
    repo: JobListingRepository = Depends(repository(JobListingRepository)),
):
    return DataResponse(data=await repo.update(job_id, payload.model_dump()))


@router.delete("/jobs/{job_id}", response_model=OkResponse)
async def delete_job(
    job_id: str,
    repo: JobListingRepository = Depends(repository(JobListingRepository)),
):
    # Applications for this job are kept
    await repo.delete(job_id)
    return OkResponse()


# ==================== Applications ====================

@router.get("/applications", response_model=DataResponse[List[JobApplication]])
async def list_applications(
    repo: JobApplicationRepository = Depends(repository(JobApplicationRepository)),
):
    return DataResponse(data=await repo.list())


@router.post("/applications", response_model=DataResponse[JobApplication], status_code=201)
async def submit_application(
    job_id: Optional[str] = Form(None, alias="jobId"),
    name: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    phone: Optional[str] = Form(None),
    cover_letter: Optional[str] = Form(None, alias="coverLetter"),
    resume: Optional[List[UploadFile]] = File(None),
    repo: JobApplicationRepository = Depends(repository(JobApplicationRepository)),
    storage: UploadStorage = Depends(get_upload_storage),
):
    data = {
        "job_id": job_id,
        "name": name,
        "email": email,
        "phone": phone,
        "cover_letter": cover_letter,
    }
    repo.validate(data)

    stored = await storage.save_one(RESUMES, resume)
    try:
        application = await repo.submit(data, stored)
    except Exception:
        # No orphaned resumes for applications that were never recorded
        storage.remove([stored])
        raise

    logger.info(f"Application {application.id} received for job {application.job_id}")
    return DataResponse(data=application)
