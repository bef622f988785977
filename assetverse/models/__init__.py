# Models package
from assetverse.models.user import User, UserRole
from assetverse.models.asset import Asset, ProductType
from assetverse.models.asset_request import AssetRequest, RequestStatus
from assetverse.models.affiliation import EmployeeAffiliation, AffiliationStatus
from assetverse.models.assignment import AssignedAsset, AssignmentStatus, AssignmentSource
from assetverse.models.package import Package, DEFAULT_PACKAGES
from assetverse.models.payment import Payment, PaymentStatus
