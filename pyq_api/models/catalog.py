from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field


class AccountCreate(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class Account(BaseModel):
    id: int
    username: str
    password: str


class UniversityCreate(BaseModel):
    name: str = Field(..., min_length=1, description="Nom affiché (unique)")
    location: str = Field(..., min_length=1, description="Ville / région")


class University(BaseModel):
    id: int
    name: str
    location: str
    createdAt: datetime


class UniversityWithStats(University):
    paperCount: int = Field(..., ge=0)
    latestUpload: Optional[str] = Field(None, description="Ex: 'Today', '2 weeks ago'")
    yearRange: str = Field(..., description="'{min}-{max}' ou 'No papers'")
    recentSubjects: List[str] = Field(default_factory=list)


class PaperCreate(BaseModel):
    universityId: int
    title: str = Field(..., min_length=1)
    subject: str = Field(..., min_length=1)
    year: int
    semester: Optional[str] = None
    examType: str = Field(..., min_length=1)
    fileName: str
    filePath: str
    fileSize: int = Field(..., ge=0, description="Taille en octets")
    mimeType: str


class Paper(BaseModel):
    id: int
    universityId: int
    title: str
    subject: str
    year: int
    semester: Optional[str] = None
    examType: str
    fileName: str
    filePath: str
    fileSize: int
    mimeType: str
    uploadedAt: datetime


class PaperWithUniversity(Paper):
    university: University


class PaperFilter(BaseModel):
    universityIds: Optional[List[int]] = None
    years: Optional[List[int]] = None
    subjects: Optional[List[str]] = None


class CatalogStats(BaseModel):
    totalUniversities: int
    totalPapers: int
    recentUploads: int = Field(..., description="Papiers uploadés sur les 7 derniers jours")


class UploadResponse(BaseModel):
    message: str
    papers: List[Paper]
