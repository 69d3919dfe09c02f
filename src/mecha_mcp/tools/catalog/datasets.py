"""Dataset tools: list, create, get, update, delete."""

from __future__ import annotations

from typing import Annotated, Optional
from uuid import UUID

from pydantic import Field

from ..endpoint import ALL_FIELDS, Endpoint, ToolParams

Title = Annotated[str, Field(max_length=70)]
Description = Annotated[str, Field(max_length=150)]


class Dataset(ToolParams):
    id: UUID
    title: Title
    description: Description
    user_email: str
    created_at: str
    updated_at: str


class DatasetDetail(Dataset):
    """Single dataset with the number of instructions it holds."""

    instructions_count: int


class CreateDatasetParams(ToolParams):
    title: Title
    description: Description


class DatasetIdParams(ToolParams):
    dataset_id: str = Field(..., description="Dataset id")


class DatasetUpdate(ToolParams):
    title: Optional[Title] = None
    description: Optional[Description] = None


class UpdateDatasetParams(ToolParams):
    dataset_id: str
    update_data: DatasetUpdate


DATASET_ENDPOINTS: tuple[Endpoint, ...] = (
    Endpoint(
        name="list-datasets",
        title="List Datasets",
        description="List all user's datasets",
        category="datasets",
        method="GET",
        path="datasets",
        response="structured",
        output_key="datasets",
        output_type=list[Dataset],
    ),
    Endpoint(
        name="create-dataset",
        title="Create a dataset",
        description="Create a new dataset",
        category="datasets",
        method="POST",
        path="datasets",
        params=CreateDatasetParams,
        body=ALL_FIELDS,
        encoding="form",
        response="structured",
        output_key="dataset",
        output_type=Dataset,
    ),
    Endpoint(
        name="get-dataset",
        title="Get a dataset",
        description="Get a dataset by id",
        category="datasets",
        method="GET",
        path="datasets/{datasetId}",
        params=DatasetIdParams,
        response="structured",
        output_key="dataset",
        output_type=DatasetDetail,
    ),
    Endpoint(
        name="update-dataset",
        title="Update a dataset",
        description="Update the name or the description of a dataset",
        category="datasets",
        method="PATCH",
        path="datasets/{datasetId}",
        params=UpdateDatasetParams,
        body="updateData",
        encoding="form",
    ),
    Endpoint(
        name="delete-dataset",
        title="Delete a dataset",
        description="Delete a dataset",
        category="datasets",
        method="DELETE",
        path="datasets/{datasetId}",
        params=DatasetIdParams,
    ),
)
