"""Map stored documents (camelCase fields) to domain entities and back.

``*_from_doc`` builds an entity from a StoredDocument; ``*_to_data`` returns
the field dict to write (the document ID is not a field).
"""

from __future__ import annotations

from typing import Any

from assetverse.application.interfaces.store import StoredDocument
from assetverse.domain.entities import (
    AffiliationEntity,
    AssetEntity,
    AssetRequestEntity,
    AssignmentEntity,
    PackageEntity,
    PaymentEntity,
    UserEntity,
)
from assetverse.domain.enums import (
    AffiliationStatus,
    AssignmentStatus,
    PaymentStatus,
    ProductType,
    RequestStatus,
    UserRole,
)


def user_from_doc(doc: StoredDocument) -> UserEntity:
    d = doc.data
    return UserEntity(
        id=doc.id,
        email=d.get("email", ""),
        name=d.get("name", ""),
        role=UserRole(d.get("role", UserRole.EMPLOYEE.value)),
        company_name=d.get("companyName"),
        company_logo=d.get("companyLogo"),
        package_limit=d.get("packageLimit"),
        current_employees=d.get("currentEmployees"),
        subscription=d.get("subscription"),
        profile_image=d.get("profileImage"),
        date_of_birth=d.get("dateOfBirth"),
        created_at=d.get("createdAt"),
        updated_at=d.get("updatedAt"),
    )


def user_to_data(user: UserEntity) -> dict[str, Any]:
    data: dict[str, Any] = {
        "email": user.email,
        "name": user.name,
        "role": user.role.value,
        "profileImage": user.profile_image,
        "dateOfBirth": user.date_of_birth,
        "createdAt": user.created_at,
        "updatedAt": user.updated_at,
    }
    if user.is_hr():
        data.update(
            {
                "companyName": user.company_name,
                "companyLogo": user.company_logo,
                "packageLimit": user.package_limit,
                "currentEmployees": user.current_employees,
                "subscription": user.subscription,
            }
        )
    return data


def asset_from_doc(doc: StoredDocument) -> AssetEntity:
    d = doc.data
    return AssetEntity(
        id=doc.id,
        product_name=d.get("productName", ""),
        product_type=ProductType(d.get("productType", ProductType.RETURNABLE.value)),
        product_quantity=int(d.get("productQuantity", 0)),
        available_quantity=int(d.get("availableQuantity", 0)),
        hr_email=d.get("hrEmail", ""),
        company_name=d.get("companyName", ""),
        product_image=d.get("productImage"),
        date_added=d.get("dateAdded"),
        updated_at=d.get("updatedAt"),
    )


def asset_to_data(asset: AssetEntity) -> dict[str, Any]:
    return {
        "productName": asset.product_name,
        "productType": asset.product_type.value,
        "productQuantity": asset.product_quantity,
        "availableQuantity": asset.available_quantity,
        "productImage": asset.product_image,
        "hrEmail": asset.hr_email,
        "companyName": asset.company_name,
        "dateAdded": asset.date_added,
        "updatedAt": asset.updated_at,
    }


def request_from_doc(doc: StoredDocument) -> AssetRequestEntity:
    d = doc.data
    return AssetRequestEntity(
        id=doc.id,
        asset_id=d.get("assetId", ""),
        product_name=d.get("productName", ""),
        product_type=ProductType(d.get("productType", ProductType.RETURNABLE.value)),
        requester_email=d.get("requesterEmail", ""),
        requester_name=d.get("requesterName", ""),
        hr_email=d.get("hrEmail", ""),
        company_name=d.get("companyName", ""),
        status=RequestStatus(d.get("status", RequestStatus.PENDING.value)),
        request_date=d.get("requestDate"),
        note=d.get("note"),
        processed_date=d.get("processedDate"),
        processed_by=d.get("processedBy"),
    )


def request_to_data(request: AssetRequestEntity) -> dict[str, Any]:
    return {
        "assetId": request.asset_id,
        "productName": request.product_name,
        "productType": request.product_type.value,
        "requesterEmail": request.requester_email,
        "requesterName": request.requester_name,
        "hrEmail": request.hr_email,
        "companyName": request.company_name,
        "status": request.status.value,
        "requestDate": request.request_date,
        "note": request.note,
        "processedDate": request.processed_date,
        "processedBy": request.processed_by,
    }


def assignment_from_doc(doc: StoredDocument) -> AssignmentEntity:
    d = doc.data
    return AssignmentEntity(
        id=doc.id,
        asset_id=d.get("assetId", ""),
        product_name=d.get("productName", ""),
        product_type=ProductType(d.get("productType", ProductType.RETURNABLE.value)),
        employee_email=d.get("employeeEmail", ""),
        employee_name=d.get("employeeName", ""),
        hr_email=d.get("hrEmail", ""),
        company_name=d.get("companyName", ""),
        status=AssignmentStatus(d.get("status", AssignmentStatus.ASSIGNED.value)),
        assignment_date=d.get("assignmentDate"),
        request_id=d.get("requestId"),
        return_date=d.get("returnDate"),
    )


def assignment_to_data(assignment: AssignmentEntity) -> dict[str, Any]:
    return {
        "assetId": assignment.asset_id,
        "productName": assignment.product_name,
        "productType": assignment.product_type.value,
        "employeeEmail": assignment.employee_email,
        "employeeName": assignment.employee_name,
        "hrEmail": assignment.hr_email,
        "companyName": assignment.company_name,
        "status": assignment.status.value,
        "assignmentDate": assignment.assignment_date,
        "requestId": assignment.request_id,
        "returnDate": assignment.return_date,
    }


def affiliation_from_doc(doc: StoredDocument) -> AffiliationEntity:
    d = doc.data
    return AffiliationEntity(
        id=doc.id,
        employee_email=d.get("employeeEmail", ""),
        employee_name=d.get("employeeName", ""),
        hr_email=d.get("hrEmail", ""),
        company_name=d.get("companyName", ""),
        status=AffiliationStatus(d.get("status", AffiliationStatus.ACTIVE.value)),
        company_logo=d.get("companyLogo"),
        affiliation_date=d.get("affiliationDate"),
        removed_date=d.get("removedDate"),
    )


def affiliation_to_data(affiliation: AffiliationEntity) -> dict[str, Any]:
    return {
        "employeeEmail": affiliation.employee_email,
        "employeeName": affiliation.employee_name,
        "hrEmail": affiliation.hr_email,
        "companyName": affiliation.company_name,
        "companyLogo": affiliation.company_logo,
        "status": affiliation.status.value,
        "affiliationDate": affiliation.affiliation_date,
        "removedDate": affiliation.removed_date,
    }


def package_from_doc(doc: StoredDocument) -> PackageEntity:
    d = doc.data
    return PackageEntity(
        id=doc.id,
        name=d.get("name", ""),
        employee_limit=int(d.get("employeeLimit", 0)),
        price=float(d.get("price", 0)),
        features=list(d.get("features") or []),
    )


def package_to_data(package: PackageEntity) -> dict[str, Any]:
    return {
        "name": package.name,
        "employeeLimit": package.employee_limit,
        "price": package.price,
        "features": list(package.features),
    }


def payment_from_doc(doc: StoredDocument) -> PaymentEntity:
    d = doc.data
    return PaymentEntity(
        id=doc.id,
        hr_email=d.get("hrEmail", ""),
        package_id=d.get("packageId", ""),
        package_name=d.get("packageName", ""),
        employee_limit=int(d.get("employeeLimit", 0)),
        amount=float(d.get("amount", 0)),
        currency=d.get("currency", ""),
        session_id=d.get("sessionId", ""),
        status=PaymentStatus(d.get("status", PaymentStatus.COMPLETED.value)),
        transaction_id=d.get("transactionId"),
        payment_date=d.get("paymentDate"),
    )


def payment_to_data(payment: PaymentEntity) -> dict[str, Any]:
    return {
        "hrEmail": payment.hr_email,
        "packageId": payment.package_id,
        "packageName": payment.package_name,
        "employeeLimit": payment.employee_limit,
        "amount": payment.amount,
        "currency": payment.currency,
        "sessionId": payment.session_id,
        "transactionId": payment.transaction_id,
        "status": payment.status.value,
        "paymentDate": payment.payment_date,
    }
