from .user import (
	UserCreate,
	UserUpdate,
	UserResponse,
	UserSummary,
	RegisterRequest,
	RegisterResponse,
	LoginRequest,
	TokenResponse,
)
from .category import (
	CategoryCreate,
	CategoryUpdate,
	CategoryResponse,
)
from .tag import (
	TagCreate,
	TagUpdate,
	TagResponse,
)
from .comment import (
	CommentCreate,
	CommentUpdate,
	CommentApprove,
	CommentPostInfo,
	CommentResponse,
	CommentAdminListResponse,
	CommentBulkAction,
	CommentBulkResponse,
	CommentCountResponse,
)
from .post import (
	PostCreate,
	PostUpdate,
	PostResponse,
	PostDetailResponse,
)
from .analytics import (
	PostSummary,
	StatusStats,
	MonthlyStats,
	DashboardStatsResponse,
)
from .upload import (
	UploadResponse,
	FeaturedImageResponse,
)
