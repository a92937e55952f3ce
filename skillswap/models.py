import enum

from sqlalchemy import false, func, text, true

from skillswap import db


class ProofStatus(str, enum.Enum):
    PENDING = 'Pending'
    APPROVED = 'Approved'
    REJECTED = 'Rejected'


class RequestType(str, enum.Enum):
    SKILL_VERIFICATION = 'SkillVerification'
    EDUCATION_VERIFICATION = 'EducationVerification'


class PostType(str, enum.Enum):
    OFFER = 'Offer'
    REQUEST = 'Request'


class PostStatus(str, enum.Enum):
    ACTIVE = 'Active'
    CLOSED = 'Closed'
    CANCELLED = 'Cancelled'
    EXPIRED = 'Expired'


class Account(db.Model):
    __tablename__ = 'accounts'
    __table_args__ = (
        # A login can be reused once the account holding it is soft-deleted
        db.Index(
            'uq_accounts_login_live', 'login', unique=True,
            postgresql_where=text('deleted_at IS NULL'),
            sqlite_where=text('deleted_at IS NULL'),
        ),
    )

    id = db.Column(db.Integer, primary_key=True)
    login = db.Column(db.String(255), nullable=False)
    password_hash = db.Column(db.Text, nullable=False)
    is_admin = db.Column(db.Boolean, nullable=False, server_default=false())
    email_confirmed = db.Column(db.Boolean, nullable=False, server_default=false())
    last_login_at = db.Column(db.DateTime, nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, server_default=func.now())
    updated_at = db.Column(db.DateTime, nullable=True)
    deleted_at = db.Column(db.DateTime, nullable=True)


class UserProfile(db.Model):
    __tablename__ = 'user_profiles'

    account_id = db.Column(db.Integer, db.ForeignKey('accounts.id'), primary_key=True)
    full_name = db.Column(db.String(255), nullable=True)
    date_of_birth = db.Column(db.Date, nullable=True)
    photo_url = db.Column(db.Text, nullable=True)
    description = db.Column(db.Text, nullable=True)
    last_seen_online = db.Column(db.DateTime, nullable=True)
    is_active = db.Column(db.Boolean, nullable=False, server_default=true())
    created_at = db.Column(db.DateTime, nullable=False, server_default=func.now())
    updated_at = db.Column(db.DateTime, nullable=True)


class SkillCategory(db.Model):
    __tablename__ = 'skill_categories'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False, unique=True)
    description = db.Column(db.Text, nullable=True)
    icon_url = db.Column(db.Text, nullable=True)
    display_order = db.Column(db.Integer, nullable=False, server_default=text('0'))
    is_active = db.Column(db.Boolean, nullable=False, server_default=true())


class SkillLevel(db.Model):
    __tablename__ = 'skill_levels'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False, unique=True)
    rank = db.Column(db.Integer, nullable=False)
    description = db.Column(db.Text, nullable=True)


class Skill(db.Model):
    __tablename__ = 'skills_catalog'

    id = db.Column(db.Integer, primary_key=True)
    skill_name = db.Column(db.String(255), nullable=False, unique=True)
    category_id = db.Column(db.Integer, db.ForeignKey('skill_categories.id'), nullable=False)
    description = db.Column(db.Text, nullable=True)
    is_active = db.Column(db.Boolean, nullable=False, server_default=true())


class UserSkill(db.Model):
    __tablename__ = 'user_skills'

    account_id = db.Column(db.Integer, db.ForeignKey('accounts.id'), primary_key=True)
    skill_id = db.Column(db.Integer, db.ForeignKey('skills_catalog.id'), primary_key=True)
    skill_level_id = db.Column(db.Integer, db.ForeignKey('skill_levels.id'), nullable=False)
    is_verified = db.Column(db.Boolean, nullable=False, server_default=false())
    verified_at = db.Column(db.DateTime, nullable=True)
    experience_years = db.Column(db.Numeric(4, 1), nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, server_default=func.now())
    updated_at = db.Column(db.DateTime, nullable=True)


class Education(db.Model):
    __tablename__ = 'education'

    id = db.Column(db.Integer, primary_key=True)
    account_id = db.Column(db.Integer, db.ForeignKey('accounts.id'), nullable=False)
    institution_name = db.Column(db.String(255), nullable=False)
    degree_field = db.Column(db.String(255), nullable=False)
    year_started = db.Column(db.Integer, nullable=True)
    year_completed = db.Column(db.Integer, nullable=True)
    degree_level = db.Column(db.String(100), nullable=True)
    is_current = db.Column(db.Boolean, nullable=False, server_default=false())
    created_at = db.Column(db.DateTime, nullable=False, server_default=func.now())


class UserContact(db.Model):
    __tablename__ = 'user_contacts'

    id = db.Column(db.Integer, primary_key=True)
    account_id = db.Column(db.Integer, db.ForeignKey('accounts.id'), nullable=False)
    contact_type = db.Column(db.String(50), nullable=False)
    contact_value = db.Column(db.String(255), nullable=False)
    is_public = db.Column(db.Boolean, nullable=False, server_default=false())
    display_order = db.Column(db.Integer, nullable=False, server_default=text('0'))
    created_at = db.Column(db.DateTime, nullable=False, server_default=func.now())


class Proof(db.Model):
    __tablename__ = 'proofs'

    id = db.Column(db.Integer, primary_key=True)
    account_id = db.Column(db.Integer, db.ForeignKey('accounts.id'), nullable=False)
    skill_id = db.Column(db.Integer, db.ForeignKey('skills_catalog.id'), nullable=True)
    education_id = db.Column(db.Integer, db.ForeignKey('education.id'), nullable=True)
    file_url = db.Column(db.Text, nullable=False)
    file_name = db.Column(db.String(255), nullable=True)
    file_size = db.Column(db.BigInteger, nullable=True)
    mime_type = db.Column(db.String(100), nullable=True)
    status = db.Column(db.String(20), nullable=False, server_default=ProofStatus.PENDING.value)
    verified_by = db.Column(db.Integer, nullable=True)
    verified_at = db.Column(db.DateTime, nullable=True)
    rejection_reason = db.Column(db.Text, nullable=True)
    expires_at = db.Column(db.DateTime, nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, server_default=func.now())
    updated_at = db.Column(db.DateTime, nullable=True)


class VerificationRequest(db.Model):
    __tablename__ = 'verification_requests'

    id = db.Column(db.Integer, primary_key=True)
    account_id = db.Column(db.Integer, db.ForeignKey('accounts.id'), nullable=False)
    proof_id = db.Column(db.Integer, db.ForeignKey('proofs.id'), nullable=False, unique=True)
    request_type = db.Column(db.String(30), nullable=False)
    status = db.Column(db.String(20), nullable=False, server_default=ProofStatus.PENDING.value)
    reviewed_by = db.Column(db.Integer, nullable=True)
    reviewed_at = db.Column(db.DateTime, nullable=True)
    review_notes = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, server_default=func.now())
    updated_at = db.Column(db.DateTime, nullable=True)


class SkillPost(db.Model):
    __tablename__ = 'skill_posts'

    id = db.Column(db.Integer, primary_key=True)
    account_id = db.Column(db.Integer, db.ForeignKey('accounts.id'), nullable=False)
    skill_id = db.Column(db.Integer, db.ForeignKey('skills_catalog.id'), nullable=False)
    post_type = db.Column(db.String(20), nullable=False)
    title = db.Column(db.String(255), nullable=False)
    details = db.Column(db.Text, nullable=False)
    status = db.Column(db.String(20), nullable=False, server_default=PostStatus.ACTIVE.value)
    contact_preference = db.Column(db.String(255), nullable=True)
    expires_at = db.Column(db.DateTime, nullable=True)
    views_count = db.Column(db.Integer, nullable=False, server_default=text('0'))
    created_at = db.Column(db.DateTime, nullable=False, server_default=func.now())
    updated_at = db.Column(db.DateTime, nullable=True)
    deleted_at = db.Column(db.DateTime, nullable=True)


class AuditLogEntry(db.Model):
    __tablename__ = 'audit_log'

    id = db.Column(db.Integer, primary_key=True)
    actor_account_id = db.Column(db.Integer, nullable=True)
    action = db.Column(db.String(50), nullable=False)
    entity_type = db.Column(db.String(50), nullable=False)
    entity_id = db.Column(db.Integer, nullable=False)
    details = db.Column(db.Text, nullable=True)
    result = db.Column(db.String(20), nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, server_default=func.now())
