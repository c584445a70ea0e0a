"""Customer routes."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from vidly.database import get_session
from vidly.models.customer import Customer
from vidly.models.user import User
from vidly.routers.dependencies import Page, commit_session, parse_id_or_404
from vidly.schemas.catalog import CustomerRequest, CustomerResponse
from vidly.services.auth import require_admin, require_user

router = APIRouter(prefix="/api/customers", tags=["customers"])


async def _get_customer_or_404(session: AsyncSession, customer_id: str) -> Customer:
    """Return a customer or raise 404.

    Parameters
    ----------
    session : AsyncSession
        Active database session.
    customer_id : str
        Raw customer identifier.

    Returns
    -------
    Customer
        Matching customer row.
    """
    customer = await session.get(
        Customer, parse_id_or_404(customer_id, "Customer not found")
    )
    if customer is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Customer not found",
        )
    return customer


@router.get("", response_model=list[CustomerResponse])
async def list_customers(
    _: User = Depends(require_user),
    page: Page = Depends(),
    session: AsyncSession = Depends(get_session),
) -> list[CustomerResponse]:
    """List customers by name."""
    result = await session.execute(
        select(Customer)
        .order_by(Customer.name.asc(), Customer.id.asc())
        .limit(page.limit)
        .offset(page.offset)
    )
    return [CustomerResponse.model_validate(row) for row in result.scalars().all()]


@router.get("/{customer_id}", response_model=CustomerResponse)
async def get_customer(
    customer_id: str,
    _: User = Depends(require_user),
    session: AsyncSession = Depends(get_session),
) -> CustomerResponse:
    """Fetch one customer."""
    customer = await _get_customer_or_404(session, customer_id)
    return CustomerResponse.model_validate(customer)


@router.post("", response_model=CustomerResponse)
async def create_customer(
    payload: CustomerRequest,
    _: User = Depends(require_user),
    session: AsyncSession = Depends(get_session),
) -> CustomerResponse:
    """Create a customer."""
    customer = Customer(**payload.model_dump())
    session.add(customer)
    await session.flush()
    await commit_session(session)
    return CustomerResponse.model_validate(customer)


@router.put("/{customer_id}", response_model=CustomerResponse)
async def update_customer(
    customer_id: str,
    payload: CustomerRequest,
    _: User = Depends(require_user),
    session: AsyncSession = Depends(get_session),
) -> CustomerResponse:
    """Replace a customer's details.

    Existing rentals keep the name and phone captured at checkout.
    """
    customer = await _get_customer_or_404(session, customer_id)
    for field, value in payload.model_dump().items():
        setattr(customer, field, value)
    await commit_session(session)
    return CustomerResponse.model_validate(customer)


@router.delete("/{customer_id}", response_model=CustomerResponse)
async def delete_customer(
    customer_id: str,
    _: User = Depends(require_admin),
    session: AsyncSession = Depends(get_session),
) -> CustomerResponse:
    """Delete a customer and return it."""
    customer = await _get_customer_or_404(session, customer_id)
    response = CustomerResponse.model_validate(customer)
    await session.delete(customer)
    await commit_session(session)
    return response
